"""Exporters that write benchmark results as markup tables, CSV or JSON."""