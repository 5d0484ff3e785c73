"""
Project Domain - Design projects and their execution.

This domain handles the life of a design project:
- Opening projects from client briefs
- Tracking the execution checklist and deriving progress from it
- Scheduling tasks by priority and due date
- Tracking materials through procurement and aggregating their cost
- Working drawings, mood board and furniture layout approvals
"""
