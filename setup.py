from setuptools import setup


setup(
    name="repertoire-sheets",
    version="0.1.0",
    description="Read choir repertoire spreadsheets (xlsx or published Google Sheets) into structured data",
    packages=["repertoire_sheets", "repertoire_sheets.extractors"],
    install_requires=[
        "pandas",
        "chardet",
        "openpyxl",
        "requests",
    ],
    extras_require={
        "excel-legacy": ["xlrd"],
        "ods": ["odfpy"],
        "all": ["xlrd", "odfpy"],
    },
    entry_points={
        "console_scripts": [
            "repertoire-sheets=repertoire_sheets.cli:main",
        ]
    },
)
