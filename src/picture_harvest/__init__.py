# ABOUTME: Picture Harvest - collects picture ids referenced by DynamoDB content records
# ABOUTME: Package root exposing the version string

__version__ = "0.1.0"
