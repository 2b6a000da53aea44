"""Routing — route compilation, fulfillment, and handler records.

Routes are compiled once at registration time; every incoming URL is
matched against the precompiled component tuples.
"""
