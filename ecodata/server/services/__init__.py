"""
Server-side services: accounts, email notifications, Stripe payments and
campaign data.
"""
