"""
User-facing (Hebrew) strings shown by the dashboard.
"""

TITLE = "🗳️ תוצאות מועצות סניפים - ליכוד 2026"
LOADING = "טוען נתונים..."
LOAD_ERROR_TITLE = "❌ שגיאה"
LOAD_ERROR = "שגיאה בטעינת הנתונים. ודא שהקובץ ציבורי."
RETRY = "נסה שוב"
REFRESH = "🔄 רענן"
OPEN_SHEET = "📊 Google Sheets"
SEARCH_PLACEHOLDER = "חפש סניף או שם..."
SUBTITLE = 'סה"כ {total} רשימות | {with_data} עם תוצאות | {without_data} ללא תוצאות | {manual} ידני'
FILTER_ALL = "הכל ({count})"
FILTER_HAS_DATA = "עם תוצאות ({count})"
FILTER_NO_DATA = "ללא תוצאות ({count})"
EMPTY = "אין נתונים להצגה"
FOOTER = 'נתונים מעודכנים מ-Google Sheets | לחץ "רענן" לעדכון אחרון'
SORT_BY = "מיין לפי {header}"
DOWNLOAD_CSV = "הורד CSV"

KPI_TOTAL = 'סה"כ רשימות'
KPI_WITH_DATA = "עם תוצאות"
KPI_WITHOUT_DATA = "ללא תוצאות"
KPI_MANUAL = "עודכנו ידנית"

EDIT_ACTION = "✏️"
EDIT_ACTION_HELP = "הוספת נתונים ידנית"
EDIT_TITLE = "✏️ הוספת נתונים ידנית"
EDIT_BRANCH = "סניף"
EDIT_LIST_LEADER = "ראש רשימה"
EDIT_VOTES = "מספר קולות *"
EDIT_VOTES_PLACEHOLDER = "לדוגמה: 300"
EDIT_SOURCE = "מקור המידע (אופציונלי)"
EDIT_SOURCE_PLACEHOLDER = "לדוגמה: פגישה עם ראש הסניף"
EDIT_CANCEL = "ביטול"
EDIT_SAVE = "💾 שמור"
EDIT_FOOTER = "הנתונים יישמרו ב-Google Sheets ויעודכנו אוטומטית"
SAVING = "💾 שומר..."
EDIT_SAVED = "הנתונים נשמרו בהצלחה!"

INVALID_VOTES = "נא להזין מספר קולות תקין"
SAVE_ERROR = "שגיאה בשמירה. נסה שוב."
ROW_NOT_FOUND = "לא נמצאה שורה מתאימה"
REMOTE_ERROR = "השרת דחה את העדכון: {detail}"
CONFIG_ERROR = "שגיאת הגדרות: {detail}"

DEFAULT_SOURCE = "ידני"
