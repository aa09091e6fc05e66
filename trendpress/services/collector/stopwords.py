"""Keyword stopword sets.

Terms that are too generic to be a trending search term on their own, plus
navigation chrome that portal scrapers pick up by accident. Comparison is
exact on the whole term (and on its lowercase form).
"""

NEWS_VERBS = frozenset(
    {
        "지지", "반대", "충격", "투사", "어린", "확인", "공개", "발표", "논란", "화제",
        "대응", "조사", "검토", "예상", "전망", "우려", "비판", "의혹", "진행", "예정",
        "결정", "승인", "거부", "요구", "주장", "강조", "보도", "문제", "상황", "사건",
        "피해", "영향", "결과", "이유", "원인", "가능", "필요", "심각", "중요", "관련",
        "해당", "감봉", "정당", "취소", "실패", "강화", "완화", "유지", "시작", "종료",
        "중단", "재개", "연기", "축소", "확대", "수정", "삭제", "생성", "복구", "지적",
        "발견", "등장", "출연", "방문", "참석", "참여", "지원", "제공", "소개", "언급",
        "우승", "패배", "승리", "도전", "경쟁", "대결", "선발", "교체", "투입", "합류",
        "투기", "발생", "해결", "처리", "추진", "변경", "이동", "설치", "운영", "폐쇄",
        "출발", "도착", "통과", "중지", "개방", "차단", "허용", "금지", "위반", "적발",
    }
)

PLACES_AND_INSTITUTIONS = frozenset(
    {
        "미국", "중국", "일본", "한국", "북한", "러시아", "유럽", "영국", "독일", "프랑스",
        "이탈리아", "스페인", "캐나다", "호주", "인도", "브라질", "멕시코", "터키",
        "정부", "대통령", "국회", "여당", "야당", "의원", "장관", "대표", "위원", "후보",
        "경찰", "검찰", "법원", "재판", "수사", "기소", "구속", "석방", "체포", "혐의",
        "서울", "부산", "대구", "인천", "광주", "대전", "울산", "제주",
        "국내", "국외", "해외", "전국", "전역", "일대", "인근", "주변",
    }
)

GENERIC_NOUNS = frozenset(
    {
        "세대", "자연", "사회", "경제", "문화", "교육", "과학", "기술", "환경", "건강",
        "생활", "가족", "부모", "자녀", "학생", "교사", "직원", "시민", "국민", "주민",
        "시장", "가격", "비용", "수익", "매출", "투자", "금리", "물가", "임금", "연봉",
        "한국인", "외국인", "남성", "여성", "청년", "노인", "어린이", "청소년", "성인",
        "회사", "기업", "단체", "기관", "부서", "팀", "조직", "센터", "본부",
        "구성", "정상", "구조", "방식", "과정", "부분", "기본", "전체", "일반",
        "형태", "상태", "종류", "방법", "내용", "활동", "조건", "수준", "분야",
        "의미", "가치", "목적", "범위", "개념", "요소", "단계", "항목", "기능",
        "정거장", "요청", "판단", "입장", "향후", "약속", "임무", "역할",
        "개인비서", "자료정리", "구조분석",
        "행복", "슬픔", "분노", "기쁨", "걱정", "불안", "두려움",
    }
)

ADVERBS_AND_CONNECTIVES = frozenset(
    {
        "많이", "매우", "정말", "진짜", "너무", "거의", "계속", "다시", "모두", "역시",
        "아직", "이미", "바로", "무슨", "어떤", "이런", "그런", "무려", "겨우", "드디어",
        "여전히", "아직도", "점차", "더욱", "갑자기", "다소", "상당히", "끝내",
        "그리고", "하지만", "그래서", "그러나", "그런데", "따라서", "또한", "비록",
        "오늘", "내일", "어제", "올해", "지난", "다음", "이번", "최근", "현재",
    }
)

HEADLINE_MODIFIERS = frozenset(
    {
        "무소속", "소속", "돌연", "결국", "사실", "실제", "과연", "역대", "최초", "최대",
        "최소", "최고", "최저", "긴급", "속보", "단독", "특종", "대형", "초대형",
        "전격", "파격", "깜짝", "초유", "이례", "잇따", "연이",
    }
)

# Fragments that leaked out of headline scraping in the past
HEADLINE_REMNANTS = frozenset(
    {
        "이들", "피해자", "오른", "연속", "나선", "전면에", "표명", "유감", "눈물",
        "홍보전", "여자도", "바닥론", "비키니", "반려견놀", "낚싯바늘", "이어트", "코르티스",
    }
)

SITE_NAMES = frozenset({"naver", "google", "daum", "youtube", "네이버", "구글", "다음", "유튜브"})

NAVIGATION_BLACKLIST = frozenset(
    {
        "정정보도 모음", "전체 언론사", "오피니언", "사설", "칼럼", "포토",
        "랭킹뉴스", "많이 본 뉴스", "최신뉴스", "더보기", "뉴스홈",
        "연예", "스포츠", "경제", "사회", "정치", "세계", "문화",
        "it/과학", "생활", "해당 언론사로 이동합니다",
        "전체보기", "닫기", "검색", "로그인", "회원가입", "설정",
    }
)

KEYWORD_STOPWORDS: frozenset[str] = (
    NEWS_VERBS
    | PLACES_AND_INSTITUTIONS
    | GENERIC_NOUNS
    | ADVERBS_AND_CONNECTIVES
    | HEADLINE_MODIFIERS
    | HEADLINE_REMNANTS
    | SITE_NAMES
    | NAVIGATION_BLACKLIST
)

__all__ = [
    "ADVERBS_AND_CONNECTIVES",
    "GENERIC_NOUNS",
    "HEADLINE_MODIFIERS",
    "HEADLINE_REMNANTS",
    "KEYWORD_STOPWORDS",
    "NAVIGATION_BLACKLIST",
    "NEWS_VERBS",
    "PLACES_AND_INSTITUTIONS",
    "SITE_NAMES",
]
