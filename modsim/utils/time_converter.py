"""
时间转换工具
提供仿真时间在不同时间单位之间的转换与格式化

功能:
- 时间单位换算
- 时间格式化
- 时间范围描述

注意: 这些函数仅用于日志与结果显示，调度器不会对事件时间做任何换算或取整
"""

from typing import Any, Dict, Union

from modsim.models.enums import TimeUnit, TIME_UNIT_SECONDS


def _as_unit(unit: Union[TimeUnit, str]) -> TimeUnit:
    """将字符串解析为TimeUnit，支持复数形式（如 "years"）"""
    if isinstance(unit, TimeUnit):
        return unit
    text = str(unit).strip().lower()
    if text.endswith("s") and text[:-1] in {u.value for u in TimeUnit}:
        text = text[:-1]
    try:
        return TimeUnit(text)
    except ValueError:
        raise ValueError(f"未知的时间单位: {unit}") from None


def convert_time(
    value: float,
    from_unit: Union[TimeUnit, str],
    to_unit: Union[TimeUnit, str]
) -> float:
    """
    时间单位换算

    Args:
        value: 时间值
        from_unit: 原单位
        to_unit: 目标单位

    Returns:
        换算后的时间值

    Example:
        >>> convert_time(2, "day", "hour")
        48.0
        >>> convert_time(1, TimeUnit.WEEK, TimeUnit.DAY)
        7.0
    """
    source = _as_unit(from_unit)
    target = _as_unit(to_unit)
    if source == target:
        return float(value)
    return value * TIME_UNIT_SECONDS[source] / TIME_UNIT_SECONDS[target]


def format_sim_time(value: float, unit: Union[TimeUnit, str] = TimeUnit.YEAR) -> str:
    """
    格式化仿真时间

    Args:
        value: 仿真时间
        unit: 时间单位

    Returns:
        格式化字符串，如 "2.5 years"

    Example:
        >>> format_sim_time(1, "year")
        '1 year'
        >>> format_sim_time(2.5, "day")
        '2.5 days'
    """
    time_unit = _as_unit(unit)
    suffix = time_unit.value if value == 1 else f"{time_unit.value}s"
    return f"{value:g} {suffix}"


def format_duration_short(value: float, unit: Union[TimeUnit, str] = TimeUnit.YEAR) -> str:
    """格式化为简短形式，如 "2.5y" """
    time_unit = _as_unit(unit)
    abbreviations = {
        TimeUnit.SECOND: "s",
        TimeUnit.MINUTE: "min",
        TimeUnit.HOUR: "h",
        TimeUnit.DAY: "d",
        TimeUnit.WEEK: "w",
        TimeUnit.MONTH: "mo",
        TimeUnit.YEAR: "y",
    }
    return f"{value:g}{abbreviations[time_unit]}"


def get_time_range(
    start_time: float,
    end_time: float,
    unit: Union[TimeUnit, str] = TimeUnit.YEAR
) -> Dict[str, Any]:
    """
    获取时间范围描述

    Args:
        start_time: 开始时间
        end_time: 结束时间
        unit: 时间单位

    Returns:
        包含start, end, duration及格式化字符串的字典
    """
    time_unit = _as_unit(unit)
    return {
        "start": start_time,
        "end": end_time,
        "duration": end_time - start_time,
        "unit": time_unit.value,
        "formatted": (
            f"{format_sim_time(start_time, time_unit)} → "
            f"{format_sim_time(end_time, time_unit)}"
        ),
        "duration_seconds": convert_time(end_time - start_time, time_unit, TimeUnit.SECOND),
    }
