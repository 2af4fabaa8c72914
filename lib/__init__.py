# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains infrastructure helpers:
# - database.py: SQLModel engine creation and schema bootstrap
# - spaces_client.py: boto3 S3 client for DigitalOcean Spaces
# - security.py: Password hashing
# - utils.py: Shared utilities (ids, dates, file names)
#
# Import the submodules directly; this package re-exports nothing so that
# importing lib never pulls in the app configuration.
# =============================================================================
