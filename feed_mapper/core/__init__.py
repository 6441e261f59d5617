"""
Core mapping domain: models, mappers, transform engine and schema extraction.
"""
