# Routes package init
"""
HRMS Backend — API Routes Package
==================================

Route Inventory:
    - employees.py:  GET    /employee                 (list all)
                     POST   /employee                 (create)
                     PUT    /employee/{employee_id}   (update)
                     DELETE /employee/{employee_id}   (delete)
    - health.py:     GET    /health                   (service health check)

Routes stay thin: they pull the raw body and path id off the request, call
EmployeeService, and return its result. Status codes for failures come from
the exception raised.
"""
