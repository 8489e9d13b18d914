"""
枚举定义
包含系统中使用的所有枚举类型

枚举类:
- SchedulerState: 调度器状态机状态
- SimulationStatus: 仿真运行状态
- TimeUnit: 仿真时间单位（仅用于诊断显示）
"""

from enum import Enum


# 保留事件类型：每个模块必须处理
INIT_EVENT = "init"


class SchedulerState(str, Enum):
    """
    调度器状态枚举

    状态转换:
        UNINITIALIZED → SEEDED → RUNNING → DRAINED | TIME_LIMIT_REACHED → FINISHED

    Values:
        UNINITIALIZED: 未初始化
        SEEDED: 已为每个模块安排init事件
        RUNNING: 主循环运行中
        DRAINED: 事件队列已清空
        TIME_LIMIT_REACHED: 下一事件超过结束时间
        FINISHED: 终止状态
    """
    UNINITIALIZED = "uninitialized"
    SEEDED = "seeded"
    RUNNING = "running"
    DRAINED = "drained"
    TIME_LIMIT_REACHED = "time_limit_reached"
    FINISHED = "finished"


class SimulationStatus(str, Enum):
    """
    仿真状态枚举

    Values:
        PENDING: 等待运行
        RUNNING: 运行中
        COMPLETED: 已完成
        FAILED: 失败（处理器抛出异常）
    """
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class TimeUnit(str, Enum):
    """
    时间单位枚举

    仅用于日志和结果显示，调度器内部时间为无量纲实数
    """
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


# 各时间单位对应的秒数（月、年按平均日历长度）
TIME_UNIT_SECONDS = {
    TimeUnit.SECOND: 1.0,
    TimeUnit.MINUTE: 60.0,
    TimeUnit.HOUR: 3600.0,
    TimeUnit.DAY: 86400.0,
    TimeUnit.WEEK: 7 * 86400.0,
    TimeUnit.MONTH: 365.25 / 12 * 86400.0,
    TimeUnit.YEAR: 365.25 * 86400.0,
}
