"""Storefront order tracking and product verification service."""
