"""AWS implementations of the service blueprints (boto3)."""
