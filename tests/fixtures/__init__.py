"""
Test Fixtures and Utilities

Shared test data for the converter, pipeline and CLI tests.

All statement exports here are synthetic and do not contain real financial information.
"""
