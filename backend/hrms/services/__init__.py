# Services package init
"""
HRMS Backend — Services Layer
==============================

Service Inventory:
    - EmployeeService: list/create/update/delete over the employees collection

Services take raw request input (path id text, body bytes) and return schema
objects, so they can be unit-tested against a mocked collection without HTTP.
"""
