"""
Error codes returned alongside CustomHTTPException responses
"""

PAGE_SIZE_EXCEEDED = "PAGE_SIZE_EXCEEDED"
