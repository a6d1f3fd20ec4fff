"""
Catalog CSV Import

Maps delimited product files onto catalog product entities.

Main components:
- models: product entity and mapping configuration
- ingestion: CSV record reading, record mapping, import pipeline
- scripts: command-line import
"""

__version__ = "1.0.0"
