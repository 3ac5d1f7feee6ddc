"""Storefront photo → establishment identification and nearby places."""
