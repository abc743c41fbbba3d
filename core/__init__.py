"""
Core Package
============

Reusable building blocks shared by the validators and the CLI.

Modules:
- results.py: Findings, results, verdicts
- exceptions.py: Error taxonomy
- formats.py: Format enum and hint resolution
- format_detector.py: Content-based format detection
- yaml_normalizer.py: YAML to JSON-equivalent conversion
- reporting.py: Logging result reporter
- settings.py: Configuration defaults
- logging_utils.py: Logging setup
"""
