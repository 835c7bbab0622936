"""Templating — kida environment and the page views built on it.

Views are pure: they read store snapshots and return markup strings.
They never dispatch.
"""
