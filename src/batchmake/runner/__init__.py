"""Target discovery and batch builds."""
