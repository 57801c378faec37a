"""
COD Profit Analytics

Cash-basis profit/loss, courier and product performance for
cash-on-delivery e-commerce.
"""

__version__ = "1.0.0"
