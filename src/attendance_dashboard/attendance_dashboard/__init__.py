"""Attendance dashboard package.

This package is organized by feature modules (students, timetracking,
attendance, periods, auth) with a thin Flask controller layer over
service/repository layers.
"""
