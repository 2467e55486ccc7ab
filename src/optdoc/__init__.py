"""Turn a script's leading comment block into bash option parsing."""
