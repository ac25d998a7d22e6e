"""Supporting calculators: sun elevation, visibility probability and master status."""
