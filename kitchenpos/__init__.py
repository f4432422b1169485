"""
                Kitchen POS

Restaurant point-of-sale backend: tables, menus and the order
lifecycle (COOKING -> MEAL -> COMPLETION) behind a REST API.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
