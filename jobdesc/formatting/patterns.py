"""Pattern tables used by the sanitizer and structure detector.

Everything here is data: ordered tables of compiled patterns built once at
import time and never mutated afterwards. Adding a header synonym, a
boilerplate phrase, or a technology alias is a table edit, not a logic
change.

Table order is meaningful. The first header entry that matches a line wins,
so more specific entries must come before broader ones.
"""

import re
from dataclasses import dataclass
from typing import Pattern, Tuple

from jobdesc.domain.models import SectionRole

WORDS_PER_MINUTE = 200
HEADER_MAX_LENGTH = 60
MAX_LENGTH = 15000
TRUNCATION_MARKER = "...(truncated)"
BOILERPLATE_MAX_LENGTH = 160

# Apostrophe, straight or typographic
_AP = "['’]"


@dataclass(frozen=True)
class HeaderSynonym:
    """One row of the header synonym table.

    Attributes:
        role: Section role assigned to matching headers
        heading: Canonical heading text emitted by the renderer
        pattern: Compiled pattern, matched against the whole cleaned header
    """

    role: SectionRole
    heading: str
    pattern: Pattern[str]


def _synonym(role: SectionRole, heading: str, body: str) -> HeaderSynonym:
    return HeaderSynonym(role=role, heading=heading, pattern=re.compile(body, re.IGNORECASE))


HEADER_SYNONYMS: Tuple[HeaderSynonym, ...] = (
    _synonym(
        SectionRole.ABOUT_COMPANY,
        "About the Company",
        r"about(?: us| the company| the team| our company)?"
        r"|who we are|our (?:company|mission|story)|company (?:overview|description)",
    ),
    _synonym(
        SectionRole.ABOUT_ROLE,
        "About the Role",
        r"about (?:the|this) (?:role|position|job|opportunity)"
        r"|the (?:role|opportunity)|(?:role|job|position) (?:overview|summary|description)"
        r"|overview",
    ),
    _synonym(
        SectionRole.RESPONSIBILITIES,
        "Responsibilities",
        r"(?:key |core |main |your )?responsibilities"
        rf"|what you{_AP}?(?:ll| will) (?:do|be doing|work on)"
        r"|your (?:role|mission|impact)|duties|day[- ]to[- ]day|in this role,? you will",
    ),
    _synonym(
        SectionRole.REQUIREMENTS,
        "Requirements",
        r"(?:minimum |basic |required |key )?(?:requirements|qualifications)"
        rf"|what we{_AP}?(?:re| are) looking for|who you are|about you"
        rf"|what you{_AP}?(?:ll| will) (?:bring|need)|you (?:have|bring)"
        r"|must[- ]haves?|(?:required |technical |key )?skills(?: (?:&|and) (?:experience|qualifications))?"
        r"|experience",
    ),
    _synonym(
        SectionRole.NICE_TO_HAVE,
        "Nice to Have",
        r"nice[- ]to[- ]haves?|(?:preferred|bonus|desired) (?:qualifications|skills|experience)"
        rf"|preferred|bonus(?: points)?|(?:it{_AP}?s a |would be a )?plus",
    ),
    # Listed before benefits so "Compensation & Benefits" resolves here.
    _synonym(
        SectionRole.COMPENSATION,
        "Compensation",
        r"compensation(?: (?:&|and) (?:benefits|perks))?|(?:base |total )?(?:salary|pay)(?: range)?"
        r"|total compensation",
    ),
    _synonym(
        SectionRole.BENEFITS,
        "Benefits",
        r"(?:compensation (?:&|and) )?benefits(?: (?:&|and) perks)?|perks(?: (?:&|and) benefits)?"
        rf"|what we offer|why join us|why you{_AP}?ll love (?:it here|working here|us)"
        rf"|total rewards|what{_AP}?s in it for you",
    ),
    _synonym(
        SectionRole.TECH_STACK,
        "Tech Stack",
        r"(?:our )?tech(?:nology)? stack|our stack|technologies(?: we use)?"
        r"|tools (?:&|and) technologies|tech we use|tooling",
    ),
    _synonym(
        SectionRole.HOW_TO_APPLY,
        "How to Apply",
        r"how to apply|(?:application|interview|hiring) process|next steps",
    ),
    _synonym(
        SectionRole.LOCATION,
        "Location",
        rf"(?:work |job )?location|where you{_AP}?ll work|remote policy",
    ),
)

# Strips markdown/emphasis decoration and a trailing colon around a header.
HEADER_DECORATION = re.compile(
    r"^\s*(?:#{1,6}\s*)?[*_]{0,3}\s*(?P<title>.+?)\s*[*_]{0,3}\s*(?P<colon>[:：])?\s*[*_]{0,3}\s*$"
)


# ---------------------------------------------------------------------------
# Boilerplate
# ---------------------------------------------------------------------------

_TRAIL = r"[\s!.:>→»]*"
_NETWORKS = r"(?:twitter|x|facebook|linkedin|instagram)"

BOILERPLATE_LINE_PATTERNS: Tuple[Pattern[str], ...] = tuple(
    re.compile(rf"^(?:{body}){_TRAIL}$", re.IGNORECASE)
    for body in (
        # calls to action
        r"apply (?:now|today|here)(?: for this (?:job|position|role))?",
        r"click (?:here )?to apply",
        r"(?:submit|send) (?:your |an )?application(?: now| today)?",
        # social footers
        rf"(?:share|tweet) (?:this (?:job|position|role)|on {_NETWORKS})",
        rf"follow us on {_NETWORKS}(?:(?:,| and| &) {_NETWORKS})*",
        r"(?:know someone|refer a friend)\b.*",
        # job board chrome
        r"(?:save|report|flag|bookmark) this (?:job|position|listing)",
        r"(?:similar|related|recommended|more) jobs(?: at .+| like this)?",
        r"view all (?:jobs|openings|positions)",
        r"back to (?:jobs|all jobs|job listings|search results)",
        # provenance
        r"(?:posted via|originally posted (?:on|at)|sourced from|job source:) .+",
        # site footers
        r"we use cookies\b.*",
        r"(?:privacy policy|terms of (?:service|use)|cookie policy)"
        r"(?:\s*[|·•]\s*(?:privacy policy|terms of (?:service|use)|cookie policy))*",
        r"(?:subscribe to (?:our )?newsletter|get (?:job )?alerts|sign up for (?:job )?alerts)\b.*",
        # leftover UI placeholders
        r"\[(?:button|link|image)\]",
        r"(?:loading|please wait)(?:\.{3}|…)?",
    )
)

# A call to action trailing a complete sentence on the same line.
TRAILING_CTA = re.compile(
    rf"(?<=[.!?])\s+(?:apply (?:now|today)|click (?:here )?to apply){_TRAIL}$",
    re.IGNORECASE,
)

PUNCTUATION_ONLY = re.compile(
    r"^[\s\-–—_*•·◦▪▫●○■□►▸▹"
    r"→✓✔☑|=~.,:;!?#/\\]+$"
)


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------

SCRIPT_STYLE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
HTML_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
PARAGRAPH_BREAK_TAGS = re.compile(r"</(?:p|h[1-6]|ul|ol|table|blockquote)\s*>", re.IGNORECASE)
LINE_BREAK_TAGS = re.compile(
    r"<br\s*/?>|</(?:div|li|tr|dd|dt|section|article|header|footer)\s*>|<(?:p|h[1-6]|div|tr)\b[^>]*>",
    re.IGNORECASE,
)
LIST_ITEM_TAG = re.compile(r"<li\b[^>]*>", re.IGNORECASE)
CELL_TAGS = re.compile(r"</t[dh]\s*>", re.IGNORECASE)
ANY_TAG = re.compile(r"</?[a-zA-Z][^<>]*>|<![^<>]*>")
ENTITY = re.compile(r"&(?:#\d{1,7}|#[xX][0-9a-fA-F]{1,6}|[a-zA-Z][a-zA-Z0-9]{1,31});")

ZERO_WIDTH = re.compile("[\u200b\u200c\u200d\u2060\ufeff\u00ad]")
INLINE_SPACE = re.compile("[ \t\u00a0\u202f\u2007\u2009\u200a\u3000\f\v]+")


# ---------------------------------------------------------------------------
# Bullets and salary
# ---------------------------------------------------------------------------

BULLET = re.compile(
    r"^\s*(?:[-*+•◦▪▫●○■□◆◇►▸▹"
    r"→✓✔☑·–—]"
    r"|\d{1,2}[.)]|\(\d{1,2}\)|[a-z]\)|\([a-z]\))\s+(?P<content>\S.*)$"
)

_AMOUNT = r"(?:\d{1,3}(?:[,.]\d{3})+(?:\.\d{1,2})?|\d+(?:\.\d+)?)"
_MULTIPLIER = r"(?:\s?[kKmM]\b)?"
_SYMBOL = "[$€£¥₩]"
_CODE = r"\b(?:USD|EUR|GBP|CAD|AUD|CHF|JPY|KRW|USDC|USDT|ETH|BTC)\b"
_MONEY = (
    rf"(?:(?:{_CODE}\s?)?{_SYMBOL}\s?{_AMOUNT}{_MULTIPLIER}"
    rf"|{_CODE}\s?{_AMOUNT}{_MULTIPLIER}"
    rf"|{_AMOUNT}{_MULTIPLIER}\s?{_CODE})"
)
SALARY = re.compile(
    rf"{_MONEY}"
    rf"(?:\s*(?:-|–|—|to)\s*(?:{_CODE}\s?)?{_SYMBOL}?\s?{_AMOUNT}{_MULTIPLIER}(?:\s?{_CODE})?)?"
    r"(?:\s*(?:/|per\s+|a\s+)(?:yr|year|annum|mo|month|hr|hour)\b|\s+annually\b)?"
)


# ---------------------------------------------------------------------------
# Technology tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TechAlias:
    """A spelling that maps to a canonical technology name."""

    name: str
    pattern: Pattern[str]


def _tech(name: str, alias: str, case_sensitive: bool = False) -> TechAlias:
    flags = 0 if case_sensitive else re.IGNORECASE
    bounded = rf"(?<![\w.+#/-])(?:{alias})(?![\w+#])"
    return TechAlias(name=name, pattern=re.compile(bounded, flags))


# Acronyms and names that double as common English words are case-sensitive.
TECH_ALIASES: Tuple[TechAlias, ...] = (
    # languages
    _tech("JavaScript", r"javascript"),
    _tech("TypeScript", r"typescript"),
    _tech("Python", r"python"),
    _tech("Rust", r"rust"),
    _tech("Go", r"golang"),
    _tech("Go", r"Go(?!\s+(?:to|ahead|live|beyond|further|above|back|through)\b)", case_sensitive=True),
    _tech("Solidity", r"solidity"),
    _tech("Java", r"java"),
    _tech("C++", r"C\+\+", case_sensitive=True),
    _tech("C#", r"C#", case_sensitive=True),
    _tech("Ruby", r"ruby"),
    _tech("PHP", r"PHP", case_sensitive=True),
    _tech("Swift", r"Swift", case_sensitive=True),
    _tech("Kotlin", r"kotlin"),
    _tech("Scala", r"scala"),
    _tech("Haskell", r"haskell"),
    _tech("Elixir", r"elixir"),
    _tech("Erlang", r"erlang"),
    _tech("SQL", r"SQL", case_sensitive=True),
    # frameworks
    _tech("React", r"React(?:\.js|JS)?", case_sensitive=True),
    _tech("Vue", r"vue(?:\.js)?"),
    _tech("Angular", r"Angular(?:JS)?", case_sensitive=True),
    _tech("Next.js", r"next\.js|nextjs"),
    _tech("Node.js", r"node\.js|nodejs"),
    _tech("Express", r"Express(?:\.js)?", case_sensitive=True),
    _tech("Django", r"django"),
    _tech("Flask", r"Flask", case_sensitive=True),
    _tech("FastAPI", r"fastapi"),
    _tech("Spring", r"Spring Boot", case_sensitive=True),
    _tech("Rails", r"Ruby on Rails|Rails", case_sensitive=True),
    _tech("Laravel", r"laravel"),
    # chains and web3 tooling
    _tech("Ethereum", r"ethereum"),
    _tech("Solana", r"solana"),
    _tech("Cosmos", r"Cosmos(?: SDK)?", case_sensitive=True),
    _tech("Polkadot", r"polkadot"),
    _tech("Avalanche", r"Avalanche", case_sensitive=True),
    _tech("Arbitrum", r"arbitrum"),
    _tech("Optimism", r"Optimism", case_sensitive=True),
    _tech("Polygon", r"Polygon", case_sensitive=True),
    _tech("zkSync", r"zksync"),
    _tech("StarkNet", r"starknet"),
    _tech("Sui", r"Sui", case_sensitive=True),
    _tech("Aptos", r"aptos"),
    _tech("Web3.js", r"web3\.js|web3js"),
    _tech("Ethers.js", r"ethers(?:\.js)?"),
    _tech("Hardhat", r"hardhat"),
    _tech("Foundry", r"Foundry", case_sensitive=True),
    _tech("Anchor", r"Anchor", case_sensitive=True),
    _tech("EVM", r"EVM", case_sensitive=True),
    # data stores
    _tech("PostgreSQL", r"postgresql|postgres"),
    _tech("MySQL", r"mysql"),
    _tech("MongoDB", r"mongodb|mongo"),
    _tech("Redis", r"redis"),
    _tech("Elasticsearch", r"elasticsearch"),
    _tech("DynamoDB", r"dynamodb"),
    _tech("Supabase", r"supabase"),
    _tech("Firebase", r"firebase"),
    _tech("Kafka", r"kafka"),
    # infrastructure
    _tech("AWS", r"AWS", case_sensitive=True),
    _tech("GCP", r"GCP", case_sensitive=True),
    _tech("Azure", r"azure"),
    _tech("Docker", r"docker"),
    _tech("Kubernetes", r"kubernetes|K8s", case_sensitive=False),
    _tech("Terraform", r"terraform"),
    _tech("CI/CD", r"CI/CD", case_sensitive=True),
    _tech("GitHub Actions", r"github actions"),
)
