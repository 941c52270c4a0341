"""Abstract ports the service layer depends on."""
