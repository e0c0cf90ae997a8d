"""
careslots - appointment availability for provider booking.
"""

__version__ = "0.1.0"
