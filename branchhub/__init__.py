"""Branch network sync and customer feedback backend."""
