"""
VHSA Screening Backend Application Package

Records school health screening results (vision, hearing, acanthosis nigricans,
scoliosis) and works out which screenings each student is required to receive.
"""
