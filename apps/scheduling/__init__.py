"""Scheduling app package.

Weekly schedules, date exceptions, availability settings and the resolver
and slot generator that turn them into bookable time slots.
"""
