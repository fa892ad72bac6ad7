"""
Test suites package.

Kept importable so the runner (`run_tests.py`) and the UI suites can import
the demo page objects under `testsuites.ui_testing.pages`.
"""
