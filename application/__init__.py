"""
Application Layer for the workout builder API.

This package contains:
- ports/: Repository interfaces the use cases depend on
- use_cases/: Save, load and template-listing use cases
- wizard/: WorkflowController and its NoticeChannel
"""
