"""Pure numerical engine: inflation, contributions, projection and solvers."""
