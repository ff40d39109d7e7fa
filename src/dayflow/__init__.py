"""Dayflow HRMS package.

Feature modules (company, users, attendance, leave, payroll) each carry a
thin Flask controller on top of service and repository layers.
"""
