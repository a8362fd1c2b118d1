"""Payment-voucher ranking and drill-down pipeline."""

__version__ = "0.1.0"
