from models.entities import AppState, DailyRecord, DayStats, Task

__all__ = ["AppState", "DailyRecord", "DayStats", "Task"]
