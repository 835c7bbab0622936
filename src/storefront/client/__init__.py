"""Client runtime: history model, navigation controller, client app."""
