"""
Harvest tools.

- get_my_profile
- list_active_projects
- log_time, get_time_entries, delete_time_entry
- start_timer, stop_timer, restart_timer, get_running_timer
"""
