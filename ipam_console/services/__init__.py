"""Services exposing the fetch and mutation actions."""
