"""Work-time tracker package.

Employee work-session time tracking: clock in/out, live elapsed duration,
day/week/month totals, weekly target progress and a productivity signal.
Organized by feature modules (employees, sessions, tracking, ...) with a thin
Flask controller layer over service/repository layers.
"""
