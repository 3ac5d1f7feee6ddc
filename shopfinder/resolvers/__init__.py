"""Decision logic of the result-resolution pipeline."""
