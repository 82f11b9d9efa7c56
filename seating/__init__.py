"""Restaurant seating: customers, tables and conflict-free reservations"""

__version__ = "1.0.0"
