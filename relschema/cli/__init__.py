"""Command line interface for relschema."""
