"""Click commands registered on the diffreview group."""
