"""
Report tools: helpers for attaching artifacts to Allure reports.
"""
