"""DiGA FHIR adapter command-line interface."""
