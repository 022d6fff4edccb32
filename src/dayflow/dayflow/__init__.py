"""Dayflow HR package.

Organised by feature (users, profiles, attendance, leaves, employees, admin,
auth, tokens), each with repository/action layers and a thin Flask controller.
"""
