"""Command line front end for the placeholder image generator."""
