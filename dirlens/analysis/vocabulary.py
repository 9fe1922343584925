"""Curated vocabulary tables for directory purpose inference.

Every name list, synonym table and display string used by the analyzers lives
here, keyed by a canonical identifier. Matching code only ever deals with the
identifiers; the ``*_LABELS`` tables turn them into text for a locale.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES = ("en", "zh")


# File type categories, in canonical order. Ties in the primary file type
# ranking are broken by this order.
FILE_TYPE_CATEGORIES = (
    "component",
    "page",
    "hook",
    "utility",
    "service",
    "type",
    "model",
    "route",
    "middleware",
    "controller",
    "repository",
    "layout",
    "config",
    "test",
    "style",
    "other",
)

# Coarse directory categories
DIRECTORY_CATEGORIES = (
    "component",
    "page",
    "hook",
    "utility",
    "service",
    "type",
    "model",
    "route",
    "feature",
    "shared",
    "other",
)


# Directory name synonym -> canonical category id
CATEGORY_SYNONYMS: Dict[str, str] = {
    "components": "component",
    "component": "component",
    "cmp": "component",
    "pages": "page",
    "page": "page",
    "views": "page",
    "view": "page",
    "utils": "utility",
    "utilities": "utility",
    "helpers": "utility",
    "helper": "utility",
    "scripts": "script",
    "script": "script",
    "api": "api",
    "apis": "api",
    "services": "service",
    "service": "service",
    "i18n": "i18n",
    "locale": "i18n",
    "locales": "i18n",
    "hooks": "hook",
    "hook": "hook",
    "style": "style",
    "styles": "style",
    "css": "style",
    "scss": "style",
    "store": "store",
    "stores": "store",
    "state": "store",
    "types": "type",
    "type": "type",
    "interfaces": "type",
    "models": "model",
    "model": "model",
    "entities": "model",
    "entity": "model",
    "controllers": "controller",
    "controller": "controller",
    "repositories": "repository",
    "repository": "repository",
    "repo": "repository",
    "routes": "route",
    "route": "route",
    "routers": "route",
    "router": "route",
    "middleware": "middleware",
    "middlewares": "middleware",
    "layouts": "layout",
    "layout": "layout",
    "features": "feature",
    "feature": "feature",
    "modules": "feature",
    "module": "feature",
    "shared": "shared",
    "common": "common",
    "commons": "common",
    "config": "config",
    "configs": "config",
    "test": "test",
    "tests": "test",
    "__tests__": "test",
    "consts": "constant",
    "constants": "constant",
    "lib": "library",
    "libs": "library",
    "public": "public",
    "assets": "asset",
    "static": "static",
    "mocks": "mock",
    "mock": "mock",
    "__mocks__": "mock",
    "proto": "proto",
    "protos": "proto",
    "projects": "project",
    "project": "project",
}

CATEGORY_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "component": "components",
        "page": "pages",
        "utility": "utilities",
        "script": "scripts",
        "api": "API",
        "service": "API service",
        "i18n": "internationalization",
        "hook": "hooks",
        "style": "styles",
        "store": "state management",
        "type": "type definitions",
        "model": "data model",
        "controller": "controllers",
        "repository": "data repository",
        "route": "routes",
        "middleware": "middleware",
        "layout": "layouts",
        "feature": "feature modules",
        "shared": "shared",
        "common": "common files",
        "config": "configuration",
        "test": "tests",
        "constant": "constants",
        "library": "library",
        "public": "public resources",
        "asset": "assets",
        "static": "static assets",
        "mock": "mock data",
        "proto": "protocol definitions",
        "project": "projects",
        "javascript": "JavaScript files",
        "other": "other",
    },
    "zh": {
        "component": "组件",
        "page": "页面",
        "utility": "工具",
        "script": "脚本",
        "api": "API",
        "service": "API 服务",
        "i18n": "国际化",
        "hook": "Hooks",
        "style": "样式",
        "store": "状态管理",
        "type": "类型定义",
        "model": "数据模型",
        "controller": "控制器",
        "repository": "数据仓库",
        "route": "路由",
        "middleware": "中间件",
        "layout": "布局",
        "feature": "功能模块",
        "shared": "共享",
        "common": "公共文件",
        "config": "配置",
        "test": "测试",
        "constant": "常量",
        "library": "库",
        "public": "公共资源",
        "asset": "资源文件",
        "static": "静态资源",
        "mock": "Mock 数据",
        "proto": "协议定义",
        "project": "项目",
        "javascript": "JavaScript 文件",
        "other": "其他",
    },
}

# Phrase templates. ``{name}`` is a directory name or business term.
PHRASE_TEMPLATES: Dict[str, Dict[str, str]] = {
    "en": {
        "compound": "{name} {word}",
        "project": "{name} project",
        "submodule": "{display} submodule ({name})",
    },
    "zh": {
        "compound": "{name} {word}",
        "project": "{name} 项目",
        "submodule": "{display} 子模块（{name}）",
    },
}

# Role suffixes used by the content analyzer. ``*_keyword`` variants are used
# when the subject is a business term rather than a directory name.
CONTENT_SUFFIXES: Dict[str, Dict[str, str]] = {
    "en": {
        "page": "pages",
        "component": "components",
        "api": "API service",
        "api_keyword": "API",
        "utility": "utility functions",
        "utility_keyword": "utilities",
        "model": "data model",
        "hook": "hooks",
    },
    "zh": {
        "page": "页面",
        "component": "组件",
        "api": "API 服务",
        "api_keyword": "接口",
        "utility": "工具函数",
        "utility_keyword": "工具",
        "model": "数据模型",
        "hook": "Hooks",
    },
}

# Directory names that already say what a content role says; the content
# analyzer does not repeat them as a subject.
ROLE_DIRECTORY_NAMES: Dict[str, frozenset] = {
    "page": frozenset({"pages", "page"}),
    "component": frozenset({"components", "component"}),
    "api": frozenset({"api", "apis", "services"}),
    "utility": frozenset({"utils", "utilities", "helpers"}),
    "model": frozenset({"models", "model", "entities"}),
    "hook": frozenset({"hooks", "hook"}),
}


# Structural containers: never labeled, still part of the hierarchy.
CONTAINER_NAMES = frozenset({
    "src",
    "source",
    "sources",
    "app",
    "apps",
    "dist",
    "build",
    "out",
    "output",
    "bin",
    "node_modules",
    "vendor",
})

# Names skipped by ancestor walks. Includes every container.
MEANINGLESS_NAMES = CONTAINER_NAMES | frozenset({
    ".git",
    ".vscode",
    ".idea",
    "tmp",
    "temp",
    "cache",
    ".cache",
    "coverage",
    ".nyc_output",
})

# Vague names that do not describe their contents
GENERIC_NAMES = frozenset({
    "misc",
    "other",
    "others",
    "general",
    "generic",
    "base",
    "basic",
    "default",
    "defaults",
    "main",
    "index",
    "internal",
    "impl",
    "stuff",
    "etc",
    "extra",
    "extras",
    "unsorted",
    "new",
    "old",
    "legacy",
    "current",
})

# Ordering used to pick the function word from the dominant file types
FUNCTION_WORD_ORDER = (
    "component",
    "page",
    "service",
    "utility",
    "hook",
    "model",
    "type",
    "route",
    "middleware",
    "layout",
)

# Parent category -> function word used when file types say nothing
PARENT_FUNCTION_WORDS: Dict[str, str] = {
    "component": "component",
    "api": "service",
    "service": "service",
    "utility": "utility",
    "library": "library",
}

# File types whose fallback purpose carries the directory name
NAMED_FILE_TYPE_PURPOSES = frozenset({
    "component", "page", "hook", "utility", "service", "model",
})

# Role -> coarse directory category
ROLE_CATEGORIES: Dict[str, str] = {
    "component": "component",
    "page": "page",
    "hook": "hook",
    "utility": "utility",
    "service": "service",
    "api": "service",
    "type": "type",
    "model": "model",
    "route": "route",
    "feature": "feature",
    "shared": "shared",
    "common": "shared",
}


@dataclass(frozen=True)
class SpecialPath:
    """A path convention that overrides every other stage."""

    key: str
    names: Tuple[str, ...] = ()
    name_fragment: Optional[str] = None  # only together with requires_extension
    requires_extension: Optional[str] = None
    path_segments: Tuple[str, ...] = ()  # any one of these segment runs in the path
    path_fragments: Tuple[str, ...] = ()  # all of these segments in the path, in order


SPECIAL_PATHS: Tuple[SpecialPath, ...] = (
    SpecialPath(key="proto", names=("proto", "protos"), name_fragment="proto",
                requires_extension=".proto"),
    SpecialPath(key="mock", names=("__mocks__", "mocks", "mock")),
    SpecialPath(key="javascript", path_segments=("/public/js/", "/public/javascript/")),
    SpecialPath(key="static", path_segments=("/public/assets/", "/public/static/"),
                path_fragments=("/public/", "/assets/")),
)


# Market/region codes used as deployment suffixes (``gateway-web-hk``)
MARKET_CODES = ("id", "my", "ph", "sg", "th", "tw", "vn", "hk", "jp", "cn")


# Business-domain terms, in salience tie-break order
BUSINESS_TERMS = (
    "user", "auth", "login", "register", "profile",
    "payment", "pay", "wallet", "balance", "transaction",
    "order", "cart", "product", "inventory",
    "insurance", "claim", "policy", "premium",
    "loan", "credit", "repayment", "installment",
    "report", "dashboard", "analytics", "statistics",
    "notification", "message", "email", "sms",
    "document", "file", "upload", "download",
    "setting", "config", "preference",
)

BUSINESS_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "user": "user",
        "auth": "authentication",
        "login": "login",
        "register": "registration",
        "profile": "profile",
        "payment": "payment",
        "pay": "payment",
        "wallet": "wallet",
        "balance": "balance",
        "transaction": "transaction",
        "order": "order",
        "cart": "shopping cart",
        "product": "product",
        "inventory": "inventory",
        "insurance": "insurance",
        "claim": "claim",
        "policy": "policy",
        "premium": "premium",
        "loan": "loan",
        "credit": "credit",
        "repayment": "repayment",
        "installment": "installment",
        "report": "report",
        "dashboard": "dashboard",
        "analytics": "analytics",
        "statistics": "statistics",
        "notification": "notification",
        "message": "message",
        "email": "email",
        "sms": "SMS",
        "document": "document",
        "file": "file",
        "upload": "upload",
        "download": "download",
        "setting": "settings",
        "config": "configuration",
        "preference": "preferences",
    },
    "zh": {
        "user": "用户",
        "auth": "认证",
        "login": "登录",
        "register": "注册",
        "profile": "个人资料",
        "payment": "支付",
        "pay": "支付",
        "wallet": "钱包",
        "balance": "余额",
        "transaction": "交易",
        "order": "订单",
        "cart": "购物车",
        "product": "产品",
        "inventory": "库存",
        "insurance": "保险",
        "claim": "理赔",
        "policy": "保单",
        "premium": "保费",
        "loan": "贷款",
        "credit": "信用",
        "repayment": "还款",
        "installment": "分期",
        "report": "报表",
        "dashboard": "仪表盘",
        "analytics": "分析",
        "statistics": "统计",
        "notification": "通知",
        "message": "消息",
        "email": "邮件",
        "sms": "短信",
        "document": "文档",
        "file": "文件",
        "upload": "上传",
        "download": "下载",
        "setting": "设置",
        "config": "配置",
        "preference": "偏好",
    },
}

# Terms that collide with unrelated identifiers. A file containing any of the
# markers does not count as mentioning the term.
AMBIGUOUS_TERM_MARKERS: Dict[str, Tuple[str, ...]] = {
    "user": (
        "useState",
        "useEffect",
        "useContext",
        "useReducer",
        "useRef",
        "useMemo",
        "useCallback",
        "useSelector",
        "useDispatch",
    ),
}

# Naming conventions that make the same collision likely: any hook named use*.
AMBIGUOUS_TERM_PATTERNS: Dict[str, Tuple[str, ...]] = {
    "user": (r"\buse[A-Z]",),
}

# Import markers -> UI library display name
UI_LIBRARIES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("@mui/material", "from '@mui", 'from "@mui', "@material-ui/"), "Material-UI"),
    (("from 'antd'", 'from "antd"', "from 'antd/", 'from "antd/'), "Ant Design"),
    (("@chakra-ui",), "Chakra UI"),
    (("react-bootstrap",), "React Bootstrap"),
    (("@headlessui/",), "Headless UI"),
)


@dataclass(frozen=True)
class DependencyRule:
    """Packages that imply a set of directory-naming keywords."""

    packages: Tuple[str, ...]
    keywords: Tuple[str, ...]
    role: str


# Registration order matters: the first registered dependency wins ties.
DEPENDENCY_RULES: Tuple[DependencyRule, ...] = (
    DependencyRule(
        ("i18next", "react-i18next", "next-i18next", "@lingui/core", "vue-i18n"),
        ("i18n", "locale", "locales", "lang", "language", "translation", "translations"),
        "i18n",
    ),
    DependencyRule(("redux", "@reduxjs/toolkit", "react-redux"),
                   ("redux", "store", "stores", "slice", "slices", "state"), "store"),
    DependencyRule(("zustand",), ("store", "stores", "zustand"), "store"),
    DependencyRule(("mobx", "mobx-react"), ("store", "stores", "mobx"), "store"),
    DependencyRule(("recoil",), ("store", "stores", "recoil", "atom", "atoms"), "store"),
    DependencyRule(("jotai",), ("store", "stores", "jotai", "atom", "atoms"), "store"),
    DependencyRule(("pinia", "vuex"), ("store", "stores", "pinia", "vuex"), "store"),
    DependencyRule(("@mui/material", "@mui/core", "material-ui"),
                   ("mui", "material", "components"), "component"),
    DependencyRule(("antd", "@ant-design/icons"), ("antd", "ant", "components"), "component"),
    DependencyRule(("@chakra-ui/react", "chakra-ui"), ("chakra", "components"), "component"),
    DependencyRule(("tailwindcss", "@tailwindcss/forms"),
                   ("tailwind", "tailwind.config", "styles"), "style"),
    DependencyRule(("next-auth", "auth0", "@auth0/nextjs-auth0"),
                   ("auth", "authentication", "next-auth"), "auth"),
    DependencyRule(("react-router", "react-router-dom", "@tanstack/react-router", "vue-router"),
                   ("router", "routers", "routes", "route"), "route"),
    DependencyRule(("react-hook-form", "@hookform/resolvers"),
                   ("react-hook-form", "hookform", "hook-form"), "form"),
    DependencyRule(("formik",), ("formik",), "form"),
    DependencyRule(("jest", "@testing-library/react", "vitest", "pytest"),
                   ("test", "tests", "__tests__", "__test__", "spec", "specs"), "test"),
    DependencyRule(("eslint", "@typescript-eslint/eslint-plugin"),
                   ("eslint", ".eslintrc", "lint"), "lint"),
    DependencyRule(("prettier",), ("prettier", ".prettierrc"), "lint"),
    DependencyRule(("react-query", "@tanstack/react-query"),
                   ("query", "queries", "react-query"), "data"),
    DependencyRule(("swr",), ("swr", "hooks"), "data"),
    DependencyRule(("apollo-client", "@apollo/client"), ("apollo", "graphql"), "data"),
    DependencyRule(("date-fns", "dayjs", "moment", "luxon"),
                   ("date", "dates", "time", "calendar"), "utility"),
    DependencyRule(("lodash", "lodash-es"), ("lodash", "utils"), "utility"),
    DependencyRule(("ramda",), ("ramda", "utils"), "utility"),
    DependencyRule(("alembic",), ("alembic", "migrations"), "migration"),
    DependencyRule(("celery",), ("celery", "tasks", "workers"), "task"),
    DependencyRule(("babel", "flask-babel"), ("translations", "locales"), "i18n"),
)

DEPENDENCY_DISPLAY: Dict[str, Dict[str, str]] = {
    "en": {
        "i18next": "internationalization (i18next)",
        "react-i18next": "internationalization (react-i18next)",
        "next-i18next": "internationalization (next-i18next)",
        "vue-i18n": "internationalization (vue-i18n)",
        "redux": "Redux state management",
        "@reduxjs/toolkit": "Redux Toolkit",
        "react-redux": "Redux",
        "zustand": "Zustand state management",
        "mobx": "MobX state management",
        "recoil": "Recoil state management",
        "jotai": "Jotai state management",
        "pinia": "Pinia state management",
        "vuex": "Vuex state management",
        "@mui/material": "Material-UI",
        "antd": "Ant Design",
        "@chakra-ui/react": "Chakra UI",
        "tailwindcss": "Tailwind CSS",
        "next-auth": "NextAuth",
        "react-router": "React Router",
        "react-router-dom": "React Router",
        "vue-router": "Vue Router",
        "react-hook-form": "React Hook Form",
        "formik": "Formik",
        "jest": "Jest tests",
        "vitest": "Vitest tests",
        "pytest": "pytest tests",
        "eslint": "ESLint",
        "prettier": "Prettier",
        "react-query": "React Query",
        "@tanstack/react-query": "TanStack Query",
        "swr": "SWR",
        "apollo-client": "Apollo Client",
        "@apollo/client": "Apollo Client",
        "date-fns": "date-fns",
        "dayjs": "Day.js",
        "lodash": "Lodash",
        "alembic": "Alembic migrations",
        "celery": "Celery tasks",
        "babel": "Babel translations",
        "flask-babel": "Flask-Babel translations",
    },
    "zh": {
        "i18next": "国际化（i18next）",
        "react-i18next": "国际化（react-i18next）",
        "next-i18next": "国际化（next-i18next）",
        "vue-i18n": "国际化（vue-i18n）",
        "redux": "Redux 状态管理",
        "@reduxjs/toolkit": "Redux Toolkit",
        "react-redux": "Redux",
        "zustand": "Zustand 状态管理",
        "mobx": "MobX 状态管理",
        "recoil": "Recoil 状态管理",
        "jotai": "Jotai 状态管理",
        "pinia": "Pinia 状态管理",
        "vuex": "Vuex 状态管理",
        "@mui/material": "Material-UI",
        "antd": "Ant Design",
        "@chakra-ui/react": "Chakra UI",
        "tailwindcss": "Tailwind CSS",
        "next-auth": "NextAuth",
        "react-router": "React Router",
        "react-router-dom": "React Router",
        "vue-router": "Vue Router",
        "react-hook-form": "React Hook Form",
        "formik": "Formik",
        "jest": "Jest 测试",
        "vitest": "Vitest 测试",
        "pytest": "pytest 测试",
        "eslint": "ESLint",
        "prettier": "Prettier",
        "react-query": "React Query",
        "@tanstack/react-query": "TanStack Query",
        "swr": "SWR",
        "apollo-client": "Apollo Client",
        "@apollo/client": "Apollo Client",
        "date-fns": "date-fns",
        "dayjs": "Day.js",
        "lodash": "Lodash",
        "alembic": "Alembic 迁移",
        "celery": "Celery 任务",
        "babel": "Babel 翻译",
        "flask-babel": "Flask-Babel 翻译",
    },
}


def _table(tables: Dict[str, Dict[str, str]], locale: str) -> Dict[str, str]:
    return tables.get(locale) or tables[DEFAULT_LOCALE]


def category_label(key: str, locale: str = DEFAULT_LOCALE) -> str:
    """Display label for a canonical category id."""
    return _table(CATEGORY_LABELS, locale).get(key, key)


def business_label(term: str, locale: str = DEFAULT_LOCALE) -> str:
    """Display label for a business term."""
    return _table(BUSINESS_LABELS, locale).get(term.lower(), term)


def dependency_display(name: str, locale: str = DEFAULT_LOCALE) -> str:
    """Display purpose for a dependency, falling back to its name."""
    return _table(DEPENDENCY_DISPLAY, locale).get(name, name)


def content_suffix(key: str, locale: str = DEFAULT_LOCALE) -> str:
    return _table(CONTENT_SUFFIXES, locale)[key]


def phrase(key: str, locale: str = DEFAULT_LOCALE, **values: str) -> str:
    """Fill a phrase template."""
    return _table(PHRASE_TEMPLATES, locale)[key].format(**values)


def compose(*parts: Optional[str]) -> str:
    """Join non-empty phrase parts with single spaces."""
    return " ".join(p for p in parts if p)


def is_generic_name(name: str) -> bool:
    """True for names that say nothing about a directory's contents.

    Covers meaningless non-container names, vague words, version tokens such
    as ``v2``, purely numeric names and single characters.
    """
    lower = name.lower()
    if lower in GENERIC_NAMES:
        return True
    if lower in MEANINGLESS_NAMES and lower not in CONTAINER_NAMES:
        return True
    if len(lower) <= 1 or lower.isdigit():
        return True
    return bool(re.match(r"^v\d+$", lower))
