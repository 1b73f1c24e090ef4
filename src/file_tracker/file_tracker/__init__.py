"""File Tracker package.

This package is organized by feature modules (users, files, notifications,
stats) with a thin Flask controller layer over service/repository layers.
"""
