"""
Client Domain - intake of new clients.

A client brief captures what the client asked for on the onboarding form
and is the input from which a design project is opened.
"""
