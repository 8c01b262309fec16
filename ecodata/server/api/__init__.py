"""
HTTP API routers.

Public content and forms, authentication, the donor dashboard, Stripe
payments and the admin CMS.
"""
