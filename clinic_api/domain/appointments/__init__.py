"""Appointments domain - scheduling, services on an appointment, status lifecycle"""
