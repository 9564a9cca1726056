"""
Common Error Constants

Centralized error messages to avoid string duplication.
"""

# Product input errors
ERROR_INVALID_PRODUCT_ID = "product_id must be a non-empty string or an integer"
ERROR_INVALID_PRODUCT_NAME = "name must be a string"
ERROR_INVALID_UNIT_PRICE = "unit_price must be a number"

# Subscription errors
ERROR_SUBSCRIBER_NOT_CALLABLE = "subscriber must be callable"
