def describe_trigger(alert, price):
    if alert.initial_direction == "sell":
        return f"price rose to {price} (at or above {alert.price_level})"
    if alert.initial_direction == "buy":
        return f"price fell to {price} (at or below {alert.price_level})"
    return f"price reached {price} (level {alert.price_level})"


def prepare_email_body(alert, price):
    direction = alert.initial_direction or "level"
    return f"""<html>
  <body>
    <p>Dear member,</p>
    <p>This is a price alert for <strong>{alert.symbol}</strong>.</p>
    <p>Reason for this email: <em>{describe_trigger(alert, price)}</em>.</p>
    <h3>Alert details:</h3>
    <ul>
      <li>Price level: {alert.price_level}</li>
      <li>Direction: {direction}</li>
      <li>Current price: {price}</li>
      <li>Alert id: {alert.hash}</li>
    </ul>
    <p>This alert has now been removed. Set a new one if you want to keep watching {alert.symbol}.</p>
    <p>Kind regards,<br>The trade alerts bot</p>
  </body>
</html>
"""
