"""
Commitlint setup service for cbashik-commitlint.

This service is responsible for:
- Detecting the project's package manager and git/husky state
- Installing the shared commitlint config and CLI
- Writing the commitlint configuration
- Wiring the husky commit-msg hook
"""

__version__ = "1.0.0"
__author__ = "cbashik-commitlint maintainers"
__description__ = "Idempotent commitlint + husky project setup"
