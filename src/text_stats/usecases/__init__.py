# Use cases: stages, aggregation state, config models and wiring for both topologies.
