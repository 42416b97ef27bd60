"""Services attached to appointments, with the price charged at booking time"""
