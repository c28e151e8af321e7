"""Clinic front-office API: patients, billing, inventory, expenses and reports."""

__version__ = "1.0.0"
