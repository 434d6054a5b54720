"""AWS Lambda adapters around the link engine."""
