"""Class Attendance Tracker package.

This package is organized by feature modules (users, attendance, timetable, stats)
with a thin Flask controller layer and service/repository layers underneath.
"""
