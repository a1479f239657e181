"""
Utility modules for the dental directory backend.

This package contains shared helpers used across the application:
Malaysia timezone and time-of-day utilities and clinic query helpers.
"""
