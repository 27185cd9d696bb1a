"""HTTP layer for the news API: app factory, routes and error dispatch."""
