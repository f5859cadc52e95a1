"""FX and gold forecasting dashboard."""
