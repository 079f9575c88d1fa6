"""Framework integrations for hanko-pagination."""
