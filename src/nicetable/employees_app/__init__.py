"""Employee dashboard demo for DataTable."""
