"""Routing — compiled endpoint router, the shell route table, and the
request classifier that decides between assets, the shell, and 404s.

Tables are built once at startup and are immutable afterwards.
"""
