"""
DESKMATE - Deadlines, Education, Skills and Knowledge MAnagement Toolkit

A personal productivity system that keeps every piece of state in one local JSON
document.

Architecture:
- Storage Context: Document schema, migration and whole-document persistence
- Reminders Context: Deadline reminders and the escalating deadline monitor
- Notifications Context: Local alerts and email delivery
- Skills Context: Skill vocabulary, extraction and the skills inventory
- Timetable Context: Class timetable entries
- Attendance Context: Subjects, attendance records and statistics
"""

__version__ = "0.1.0"
