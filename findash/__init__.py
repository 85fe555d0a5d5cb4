"""findash - personal finance dashboard with a pure aggregation core."""
