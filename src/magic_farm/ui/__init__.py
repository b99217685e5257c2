"""On-screen UI drawn over the scene."""
