"""Shoestore API.

Footwear storefront catalog service.
"""
