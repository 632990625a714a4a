"""Operator scripts for index setup, purging and bulk upload."""
