"""Django project package for the workforce notification service."""
