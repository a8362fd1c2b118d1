from setuptools import setup


setup(
    name="voucher-analyzer",
    version="0.1.0",
    description="Ranked payment-voucher summaries from messy spreadsheet exports",
    packages=["voucher_analyzer"],
    install_requires=[
        "pandas",
        "chardet",
        "openpyxl",
        "matplotlib",
        "streamlit",
    ],
    extras_require={
        "excel-legacy": ["xlrd"],
        "ods": ["odfpy"],
        "all": ["xlrd", "odfpy"],
        "test": ["pytest"],
    },
)
