"""Facility listings: the rentable spaces whose availability is scheduled."""
