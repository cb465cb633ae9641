"""Reply texts sent back to the chat."""

from datetime import date

from warikan.domain.commands import ParsedAdvancePayment
from warikan.domain.models import AdvancePayment, CycleSettlement, YearMonth

USAGE_HELP = (
    "📖 家計管理Bot 使い方\n\n"
    "【💳 カード支払い確認】\n"
    "カード支払い → 今月の支払い額を表示\n"
    "カード支払い10月 → 10月の支払い額を表示\n"
    "カード支払い2024年10月 → 指定年月の支払い額を表示\n\n"
    "【📝 建て替え記録】\n"
    "建て替え → 記録アプリのURLを表示\n"
    "建て替え11月 → 11月支払い分の記録を表示\n"
    "（期間: 9/26〜10/25）\n\n"
    "【➕ 記録追加】\n"
    "建て替え追加 夫 1000 ランチ代\n"
    "建て替え追加 10/30 妻 2000 買い物\n"
    "フォーマット → 詳しい使い方\n\n"
    "【🗑️ 記録削除】\n"
    "削除 ${ID} → 指定IDの記録を削除\n"
    "（IDは建て替え記録から確認）\n\n"
    "【ℹ️ その他】\n"
    "使い方 → このメッセージを表示\n"
    "フォーマット → 記録追加の詳細"
)

_ADD_FORMAT_BODY = (
    "【フォーマット】\n"
    "建て替え追加 支払者 金額 メモ\n"
    "建て替え追加 日付 支払者 金額 メモ\n\n"
    "【例】\n"
    "建て替え追加 夫 1000 ランチ代\n"
    "建て替え追加 10/30 妻 2000 買い物\n\n"
    "【注意】\n"
    "- 支払者: 「夫」または「妻」（必須）\n"
    "- 金額: 数字のみ（必須）\n"
    "- 日付: MM/DD形式（省略時=今日）\n"
    "- メモ: 任意のテキスト（必須）"
)

DELETE_USAGE = "❌ 削除するIDを指定してください\n\n使い方: 削除 ${ID}\n例: 削除 1a2b3c4d"

GREETING = "hello"


def add_format_help(error: str | None = None) -> str:
    """Explain the add command, optionally prefixed with why the last one failed."""
    message = "📝 建て替え記録の追加方法\n\n"
    if error:
        message += f"❌ エラー: {error}\n\n"
    return message + _ADD_FORMAT_BODY


def added(parsed: ParsedAdvancePayment) -> str:
    return (
        "✅ 記録しました\n\n"
        f"{parsed.date.strftime('%Y-%m-%d')} {parsed.payer.icon} {parsed.amount.format()}\n"
        f"{parsed.memo}"
    )


def add_failed(error: Exception) -> str:
    return f"❌ 記録の追加に失敗しました\n\n{error}"


def deleted(record_id: str) -> str:
    return f"✅ 記録を削除しました\n\nID: {record_id}"


def delete_not_found(record_id: str) -> str:
    return f"ℹ️ 該当する記録はありませんでした\n\nID: {record_id}"


def delete_failed(record_id: str, error: Exception) -> str:
    return f"❌ 記録の削除に失敗しました\n\nID: {record_id}\n\n{error}"


def companion_app(url: str) -> str:
    if url:
        return f"建て替え記録アプリ:\n{url}"
    return "建て替え記録アプリのURLが設定されていません。\n設定ファイルの app.web_app_url を設定してください。"


def cycle_report(
    payment_month: YearMonth,
    start: date,
    end: date,
    payments: list[AdvancePayment],
    settlement: CycleSettlement,
) -> str:
    """Render the advance payments of one billing cycle with totals and settlement."""
    if not payments:
        return f"【{payment_month.format()}支払い分】\n建て替え記録がありません。"

    lines = [
        "📝 建て替え記録",
        f"【{payment_month.format()}支払い分】",
        f"期間: {start.strftime('%Y-%m-%d')} 〜 {end.strftime('%Y-%m-%d')}",
        "",
        "--- 記録 ---",
    ]
    for payment in payments:
        lines.append(f"[ID: {payment.id}]")
        lines.append(f"{payment.formatted_date()} {payment.payer.icon} {payment.amount.format()}")
        lines.append(payment.memo)
        lines.append("")

    lines.append("--- 合計 ---")
    lines.append(f"👨 夫: {settlement.husband_total.format()}")
    lines.append(f"👩 妻: {settlement.wife_total.format()}")
    lines.append("")
    lines.append("--- 清算 ---")

    if settlement.debtor is None or settlement.creditor is None:
        lines.append("差額なし")
    else:
        debtor, creditor = settlement.debtor, settlement.creditor
        lines.append(
            f"{debtor.icon} {debtor.value} → {creditor.icon} {creditor.value}: {settlement.half_difference.format()}"
        )

    return "\n".join(lines)


def error_report(error: BaseException, stack: str) -> str:
    return f"エラーが発生しました:\n\n{error}\n\nStack:\n{stack or 'スタックトレースなし'}"
