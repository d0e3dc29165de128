"""FitCheck daily readiness API."""
