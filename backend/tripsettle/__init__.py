"""tripsettle - expense balance and settlement engine for group trips."""
