"""Calendar math and the instant/span value types."""
