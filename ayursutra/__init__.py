"""
AyurSutra backend: therapy center dashboard over in-memory mock data.

Structure:
- config.py         : settings from environment / .env
- logging_config.py : root logger setup
- models.py         : record dataclasses and enums
- db.py             : in-memory store and sessions
- seed.py           : mock records and static analytics arrays
- services.py       : domain logic (bookings, progress, notifications, feedback, reports)
- api_main.py       : FastAPI application
- client.py         : HTTP client used by the Streamlit dashboard
- cli.py            : command line (serve, list, stats, notifications)
"""
