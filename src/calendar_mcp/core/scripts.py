"""AppleScript source for every Calendar operation.

Builders are pure: they return the text handed to ``osascript``. Dynamic
values go through :func:`quote_applescript`; date boundaries go through
:func:`format_for_applescript`. Listings emit JSON from the host side with
the helper handlers below because AppleScript has no native JSON, replace-all
or case folding.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from .dates import format_for_applescript
from .text import applescript_bool, ascii_lower, quote_applescript

APP_NAME = "Calendar"

REPLACE_TEXT_HANDLER = r"""
on replaceText(theText, searchStr, replaceStr)
	set AppleScript's text item delimiters to searchStr
	set theItems to text items of theText
	set AppleScript's text item delimiters to replaceStr
	set theText to theItems as text
	set AppleScript's text item delimiters to ""
	return theText
end replaceText
"""

ESCAPE_JSON_HANDLER = r"""
on textOrEmpty(theValue)
	if theValue is missing value then return ""
	return theValue as text
end textOrEmpty

on escapeJSON(theText)
	set theText to my replaceText(theText, "\\", "\\\\")
	set theText to my replaceText(theText, "\"", "\\\"")
	set theText to my replaceText(theText, return, "\\n")
	set theText to my replaceText(theText, linefeed, "\\n")
	set theText to my replaceText(theText, tab, "\\t")
	return theText
end escapeJSON
"""

LOWER_CASE_HANDLER = r"""
on toLowerCase(theText)
	set lowercaseChars to "abcdefghijklmnopqrstuvwxyz"
	set uppercaseChars to "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
	set resultText to ""
	considering case
		repeat with c in characters of theText
			set charOffset to offset of (c as text) in uppercaseChars
			if charOffset > 0 then
				set resultText to resultText & character charOffset of lowercaseChars
			else
				set resultText to resultText & (c as text)
			end if
		end repeat
	end considering
	return resultText
end toLowerCase
"""

EVENT_JSON_HANDLER = r"""
on eventJSON(e, calName)
	tell application "Calendar"
		set eId to uid of e
		set eSummary to my textOrEmpty(summary of e)
		set eDesc to my textOrEmpty(description of e)
		set eLoc to my textOrEmpty(location of e)
		set eUrl to my textOrEmpty(url of e)
		set eStart to (start date of e) as «class isot» as string
		set eEnd to (end date of e) as «class isot» as string
		set eAllDay to allday event of e
		set eStatus to (status of e) as text
	end tell
	set json to "{\"id\":\"" & my escapeJSON(eId) & "\","
	set json to json & "\"summary\":\"" & my escapeJSON(eSummary) & "\","
	set json to json & "\"description\":\"" & my escapeJSON(eDesc) & "\","
	set json to json & "\"location\":\"" & my escapeJSON(eLoc) & "\","
	set json to json & "\"startDate\":\"" & eStart & "\","
	set json to json & "\"endDate\":\"" & eEnd & "\","
	set json to json & "\"allDay\":" & (eAllDay as text) & ","
	set json to json & "\"calendar\":\"" & my escapeJSON(calName) & "\","
	set json to json & "\"url\":\"" & my escapeJSON(eUrl) & "\","
	set json to json & "\"status\":\"" & my escapeJSON(eStatus) & "\"}"
	return json
end eventJSON
"""

CALENDAR_JSON_HANDLER = r"""
on calendarJSON(theCal)
	tell application "Calendar"
		set calId to uid of theCal
		set calName to name of theCal
		set calColor to color of theCal
		set calWritable to writable of theCal
	end tell
	set AppleScript's text item delimiters to ","
	set colorText to calColor as text
	set AppleScript's text item delimiters to ""
	set json to "{\"id\":\"" & my escapeJSON(calId) & "\","
	set json to json & "\"name\":\"" & my escapeJSON(calName) & "\","
	set json to json & "\"color\":\"" & my escapeJSON(colorText) & "\","
	set json to json & "\"writable\":" & (calWritable as text) & "}"
	return json
end calendarJSON
"""


def _target_calendars(calendar: Optional[str]) -> str:
    if calendar:
        return f"set targetCals to {{calendar {quote_applescript(calendar)}}}"
    return "set targetCals to calendars"


def _date_literal(instant: datetime) -> str:
    return f"date {quote_applescript(format_for_applescript(instant))}"


def permission_probe_script() -> str:
    return f'tell application "{APP_NAME}" to count of calendars'


def list_calendars_script() -> str:
    body = f"""
tell application "{APP_NAME}"
	set allCals to calendars
end tell
set output to "["
repeat with i from 1 to count of allCals
	if i > 1 then set output to output & ","
	set output to output & my calendarJSON(item i of allCals)
end repeat
return output & "]"
"""
    return body + REPLACE_TEXT_HANDLER + ESCAPE_JSON_HANDLER + CALENDAR_JSON_HANDLER


STARTING_IN_RANGE = "start date ≥ startDate and start date ≤ endDate"
OVERLAPPING_RANGE = "start date < endDate and end date > startDate"


def list_events_script(
    start: datetime,
    end: datetime,
    *,
    calendar: Optional[str] = None,
    limit: int = 100,
    overlapping: bool = False,
) -> str:
    """List events as JSON.

    By default only events starting inside ``[start, end]`` are returned. With
    ``overlapping`` any event that intersects ``(start, end)`` is included,
    such as one that began the day before and is still running.
    """

    condition = OVERLAPPING_RANGE if overlapping else STARTING_IN_RANGE
    body = f"""
set matchCount to 0
set output to "["
tell application "{APP_NAME}"
	set startDate to {_date_literal(start)}
	set endDate to {_date_literal(end)}
	{_target_calendars(calendar)}
	repeat with theCal in targetCals
		if matchCount ≥ {limit} then exit repeat
		set calName to name of theCal
		set calEvents to (every event of theCal whose {condition})
		repeat with e in calEvents
			if matchCount ≥ {limit} then exit repeat
			if matchCount > 0 then set output to output & ","
			set output to output & my eventJSON(e, calName)
			set matchCount to matchCount + 1
		end repeat
	end repeat
end tell
return output & "]"
"""
    return body + REPLACE_TEXT_HANDLER + ESCAPE_JSON_HANDLER + EVENT_JSON_HANDLER


def search_events_script(
    query: str,
    start: datetime,
    end: datetime,
    *,
    calendar: Optional[str] = None,
    limit: int = 50,
) -> str:
    body = f"""
set matchCount to 0
set output to "["
set searchQuery to {quote_applescript(ascii_lower(query))}
tell application "{APP_NAME}"
	set startDate to {_date_literal(start)}
	set endDate to {_date_literal(end)}
	{_target_calendars(calendar)}
	repeat with theCal in targetCals
		if matchCount ≥ {limit} then exit repeat
		set calName to name of theCal
		set calEvents to (every event of theCal whose start date ≥ startDate and start date ≤ endDate)
		repeat with e in calEvents
			if matchCount ≥ {limit} then exit repeat
			set lowerSummary to my toLowerCase(my textOrEmpty(summary of e))
			set lowerDesc to my toLowerCase(my textOrEmpty(description of e))
			set lowerLoc to my toLowerCase(my textOrEmpty(location of e))
			if lowerSummary contains searchQuery or lowerDesc contains searchQuery or lowerLoc contains searchQuery then
				if matchCount > 0 then set output to output & ","
				set output to output & my eventJSON(e, calName)
				set matchCount to matchCount + 1
			end if
		end repeat
	end repeat
end tell
return output & "]"
"""
    return body + REPLACE_TEXT_HANDLER + ESCAPE_JSON_HANDLER + LOWER_CASE_HANDLER + EVENT_JSON_HANDLER


def create_event_script(
    *,
    summary: str,
    start: datetime,
    end: datetime,
    all_day: bool = False,
    calendar: Optional[str] = None,
    description: Optional[str] = None,
    location: Optional[str] = None,
    url: Optional[str] = None,
    recurrence: Optional[str] = None,
) -> str:
    # Without an explicit target the event lands in whatever Calendar lists first.
    target = f"calendar {quote_applescript(calendar)}" if calendar else "first calendar"
    properties = (
        f"summary:{quote_applescript(summary)}, "
        f"start date:{_date_literal(start)}, "
        f"end date:{_date_literal(end)}, "
        f"allday event:{applescript_bool(all_day)}"
    )
    lines = [
        f"set newEvent to make new event at end of events of {target} with properties {{{properties}}}",
    ]
    if description:
        lines.append(f"set description of newEvent to {quote_applescript(description)}")
    if location:
        lines.append(f"set location of newEvent to {quote_applescript(location)}")
    if url:
        lines.append(f"set url of newEvent to {quote_applescript(url)}")
    if recurrence:
        lines.append(f"set recurrence of newEvent to {quote_applescript(recurrence)}")
    lines.append("return uid of newEvent")
    return _tell_block(lines)


def update_event_script(
    event_id: str,
    calendar: str,
    *,
    summary: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    description: Optional[str] = None,
    location: Optional[str] = None,
    all_day: Optional[bool] = None,
) -> Optional[str]:
    """Return the update script, or ``None`` when no field would change."""

    changes: list[str] = []
    if summary is not None:
        changes.append(f"set summary of theEvent to {quote_applescript(summary)}")
    if description is not None:
        changes.append(f"set description of theEvent to {quote_applescript(description)}")
    if location is not None:
        changes.append(f"set location of theEvent to {quote_applescript(location)}")
    if start is not None:
        changes.append(f"set start date of theEvent to {_date_literal(start)}")
    if end is not None:
        changes.append(f"set end date of theEvent to {_date_literal(end)}")
    if all_day is not None:
        changes.append(f"set allday event of theEvent to {applescript_bool(all_day)}")
    if not changes:
        return None
    return _tell_block([*_locate_event(event_id, calendar), *changes, 'return "done"'])


def delete_event_script(event_id: str, calendar: str) -> str:
    return _tell_block([*_locate_event(event_id, calendar), "delete theEvent", 'return "done"'])


def open_calendar_script() -> str:
    return f'tell application "{APP_NAME}" to activate'


def open_date_script(day_start: datetime) -> str:
    return _tell_block(
        [
            "activate",
            "switch view to day view",
            f"view calendar at {_date_literal(day_start)}",
        ]
    )


def _locate_event(event_id: str, calendar: str) -> list[str]:
    return [
        f"set theCal to calendar {quote_applescript(calendar)}",
        f"set theEvent to (first event of theCal whose uid is {quote_applescript(event_id)})",
    ]


def _tell_block(lines: list[str]) -> str:
    body = "\n".join(f"\t{line}" for line in lines)
    return f'tell application "{APP_NAME}"\n{body}\nend tell'
