"""Routing — ordered route table shared by server and client.

Routes are registered at startup and frozen before the first request.
Resolution is first-match-wins in registration order.
"""
