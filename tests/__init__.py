"""
Test suite for the Mercuriale Order Builder.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_order_service.py -v
"""
