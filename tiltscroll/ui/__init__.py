"""Host-side glue: viewport and HUD."""
