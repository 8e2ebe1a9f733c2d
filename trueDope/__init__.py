"""Django project package for TrueDope shot statistics."""
