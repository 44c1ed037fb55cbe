"""Campus Attendance package.

Role-based attendance marking and leave approval for a university staff body.
Organized by feature modules (users, attendance, schedules, leaves, dashboard)
with a thin Flask controller layer over service/repository layers.
"""
