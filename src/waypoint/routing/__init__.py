"""Routing — ordered route table with first-match lookup.

Routes are registered during setup and frozen into a read-only table
before the app serves its first request.
"""
