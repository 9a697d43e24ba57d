"""Pure math, data contracts and interfaces. No I/O, no state."""
