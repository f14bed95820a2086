"""Pure scheduling model: no ORM, no HTTP."""
