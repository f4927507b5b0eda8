"""
Hebrew Analysis Tests Package
=============================
Test suite for dictionary resolution and the analysis components.

Run all tests: python3 -m pytest tests/hebrew/ -v
Run specific: python3 -m pytest tests/hebrew/test_resolver.py -v
"""
