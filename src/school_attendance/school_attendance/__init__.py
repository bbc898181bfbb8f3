"""School Attendance package.

Teacher attendance lifecycle: geofenced self-marking, a daily compliance
sweep that auto-marks missing teachers as Leave, holiday and policy
administration, and performance scoring. Organized by feature modules with a
thin Flask JSON controller layer over service/repository layers.
"""
