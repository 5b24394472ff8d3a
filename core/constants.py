"""
Core — Shared Constants

Pagination limits, audit action names, and business thresholds used
across apps.

@file core/constants.py
"""

# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 200


# ---------------------------------------------------------------------------
# Audit actions (mirror AuditLog.ActionChoices)
# ---------------------------------------------------------------------------

AUDIT_ACTION_CREATE = 'CREATE'
AUDIT_ACTION_UPDATE = 'UPDATE'
AUDIT_ACTION_DELETE = 'DELETE'
AUDIT_ACTION_STATUS_CHANGE = 'STATUS_CHANGE'
AUDIT_ACTION_VERIFY = 'VERIFY'
AUDIT_ACTION_LOGIN = 'LOGIN'
AUDIT_ACTION_LOGIN_FAILED = 'LOGIN_FAILED'


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------

# quantity below this (and above zero) is Low Stock
LOW_STOCK_THRESHOLD = 5
MAX_STOCK_QUANTITY = 999_999
MAX_UNIT_PRICE = '999999.99'


# ---------------------------------------------------------------------------
# Reception
# ---------------------------------------------------------------------------

RECENT_PRESCRIPTIONS_DEFAULT_LIMIT = 50
RECENT_PRESCRIPTIONS_MAX_LIMIT = 500


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

# Ethiopian mobile format: +251XXXXXXXXX or 0XXXXXXXXX
PHONE_NUMBER_REGEX = r'^(\+251|0)[0-9]{9}$'


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------

UUID_LOOKUP_REGEX = '[0-9a-fA-F-]{36}'
