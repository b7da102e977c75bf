"""
Pure composition services: strategy rules, list editing, scheduling and pages.
"""
