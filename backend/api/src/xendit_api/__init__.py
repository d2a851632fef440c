"""HTTP surface for the Xendit payment provider."""
