# con_reentrant_token.py
I = importlib

balances = Hash(default_value=decimal('0.0'))
metadata = Hash()

re_entry_owner = Variable()
re_entry_target_crowdfund_name = Variable()
re_entry_campaign_id = Variable()
re_entry_function = Variable() # 'withdraw' or 'refund'
re_entry_attempt_count = Variable()
re_entry_max_attempts = Variable()

@construct
def seed():
    balances[ctx.caller] = decimal('1000000')
    re_entry_attempt_count.set(0)
    re_entry_max_attempts.set(1) # Only re-enter once
    re_entry_owner.set(ctx.caller)

@export
def configure_re_entrancy(crowdfund_name: str, campaign_id: int, function_name: str):
    assert ctx.caller == re_entry_owner.get(), "Only owner can configure re-entrancy."
    assert function_name in ['withdraw', 'refund', ''], "Unknown re-entry function."
    re_entry_target_crowdfund_name.set(crowdfund_name)
    re_entry_campaign_id.set(campaign_id)
    re_entry_function.set(function_name)
    re_entry_attempt_count.set(0)

def re_enter(sender: str):
    # Payout from the targeted crowdfund contract triggers one nested call back into it
    target_crowdfund = re_entry_target_crowdfund_name.get()
    function_name = re_entry_function.get()
    current_attempts = re_entry_attempt_count.get()

    if not target_crowdfund or not function_name or sender != target_crowdfund:
        return
    if current_attempts >= re_entry_max_attempts.get():
        return

    re_entry_attempt_count.set(current_attempts + 1)
    crowdfund_contract = I.import_module(target_crowdfund)
    if function_name == 'withdraw':
        crowdfund_contract.withdraw(campaign_id=re_entry_campaign_id.get())
    else:
        crowdfund_contract.refund(campaign_id=re_entry_campaign_id.get())

@export
def transfer(amount: float, to: str):
    assert amount > decimal('0.0'), "Transfer amount must be positive"
    sender = ctx.caller

    sender_bal = balances[sender]
    assert sender_bal >= amount, f"Insufficient balance for sender {sender}"

    balances[sender] = sender_bal - amount
    balances[to] += amount

    re_enter(sender=sender)
    return True

@export
def approve(amount: float, to: str):
    assert amount >= decimal('0.0'), "Approve amount must be non-negative"
    balances[ctx.caller, to] = amount
    return True

@export
def transfer_from(amount: float, to: str, main_account: str):
    assert amount > decimal('0.0'), "Transfer amount must be positive"
    spender = ctx.caller

    owner_balance = balances[main_account]
    assert owner_balance >= amount, f"Insufficient balance for owner {main_account}"

    spender_allowance = balances[main_account, spender]
    assert spender_allowance >= amount, f"Insufficient allowance for spender {spender} from owner {main_account}"

    balances[main_account] = owner_balance - amount
    balances[main_account, spender] = spender_allowance - amount
    balances[to] += amount
    return True

@export
def balance_of(address: str):
    return balances[address]
