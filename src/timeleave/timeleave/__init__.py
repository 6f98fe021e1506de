"""Time-and-leave package.

Feature modules (attendance, leave, employees) each hold a domain model, a
repository protocol with its MySQL implementation, a service (the rule engine)
and a thin Flask controller.
"""
