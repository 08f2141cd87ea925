"""Attendance & Leave tracker package.

Feature modules (users, attendance, leaves) sit on top of a Google Sheets
spreadsheet used as the data store, with a thin Flask controller layer and
service/repository layers.
"""
