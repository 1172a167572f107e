"""RS-274X and Excellon emitters."""
