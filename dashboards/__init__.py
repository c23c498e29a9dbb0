"""Django app hosting dashboard definitions.

Dashboards bind a time range selector to a set of panels. The refresh service
runs each panel's query through the pure `luminous` transforms; this app only
supplies configuration and coordinates the calls.
"""
