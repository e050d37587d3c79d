"""
Command Line Interface Package

Command Structure:
- bankmerge: Main entry point with utility commands (version, config)
- bankmerge convert: Convert bank exports into one CSV or OFX file
- bankmerge payee / category: Administration of the enrichment lists
- bankmerge synonym: Add a synonym to a payee or category
"""
